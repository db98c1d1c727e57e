from tkinter import ttk

# 阶段 -> 行底色; 未列出的阶段与 STATUS 行归为 INFO
STAGE_COLORS={
    'CONVERT':'#E6F5FF',
    'SCAN':'#F0E6FF',
    'BACKUP':'#E6FFE6',
    'FAIL':'#FFE6E6',
    'SKIP':'#F5F5F5',
    'INFO':'#EEEEEE',
}

def stage_tag(stage:str)->str:
    return stage if stage in STAGE_COLORS else 'INFO'

class LogView:
    """按文件逐行显示 q_log 输出: 阶段 / 文件 / 备份 / 检测信息"""
    def __init__(self, parent):
        self.frame=ttk.Frame(parent)
        self.tree=ttk.Treeview(self.frame,columns=('stage','file','backup','info'),show='headings',height=16)
        for cid,txt,w in (('stage','阶段',70),('file','文件',340),('backup','备份',180),('info','检测信息',380)):
            self.tree.heading(cid,text=txt)
            self.tree.column(cid,width=w,anchor='w')
        bar=ttk.Scrollbar(self.frame,orient='vertical',command=self.tree.yview)
        self.tree.configure(yscrollcommand=bar.set)
        self.tree.pack(side='left',fill='both',expand=True)
        bar.pack(side='right',fill='y')
        for stage,color in STAGE_COLORS.items():
            self.tree.tag_configure(stage,background=color)

    def widget(self):
        return self.frame

    def clear(self):
        self.tree.delete(*self.tree.get_children())

    def add_raw(self, raw_line:str):
        if raw_line.startswith('LOG\t'):
            parts=raw_line.split('\t',4)
            if len(parts)<5: return
            _,stage,src,dst,info=parts
            self.tree.insert('','end',values=(stage,src,dst,info),tags=(stage_tag(stage),))
        elif raw_line.startswith('STATUS '):
            self.tree.insert('','end',values=('INFO','','',raw_line[7:]),tags=('INFO',))
        else:
            return
        self.tree.yview_moveto(1)
